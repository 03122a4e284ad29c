"""Command-line tools for the résumé store.

- ``python -m resume_ats.cli upload`` -- ingest a PDF résumé
- ``python -m resume_ats.cli query``  -- evaluate stored résumés against a question
- ``python -m resume_ats.cli stats``  -- show the stored fragment count
"""
