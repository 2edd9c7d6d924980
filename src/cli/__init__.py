"""CLI tools for the media ingestion pipeline.

- ``python -m src.cli.store`` -- validate, process and store one file with
  the configured storage backend.
"""
