"""Application layer – masking engine and its collaborators."""
