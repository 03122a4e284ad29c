"""Allow ``python -m resume_ats.cli`` execution."""

from resume_ats.cli.ingest import main

main()
