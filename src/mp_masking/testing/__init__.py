"""Testing support – pytest fixtures for masking tests.

Import in your ``conftest.py``::

    pytest_plugins = ["mp_masking.testing.fixtures"]
"""
