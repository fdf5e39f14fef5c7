"""Kernel – errors and result types shared by every mp-masking layer."""
