"""CLI tools for bandje.

- ``python -m bandje.cli`` - dataset summary, random samples and full
  export, without running the API server (see ``dataset.py``).
"""
