"""Command-line access to the résumé store without running the web server.

Usage::

    python -m resume_ats.cli upload --file resume.pdf \\
        --name "Jane Doe" --role "Backend Engineer" --github janedoe

    python -m resume_ats.cli query "Senior Python engineer with AWS experience"

    python -m resume_ats.cli stats

Heavy imports (OpenAI SDK, ChromaDB, PyMuPDF) are deferred inside the
handlers so ``--help`` stays fast.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from resume_ats.config.settings import Settings
from resume_ats.utils.errors import ATSError
from resume_ats.utils.logging import configure_logging


def _build_vector_store(app_settings: Settings):  # noqa: ANN202
    from resume_ats.providers.vector_store.chromadb_provider import ChromaDBProvider

    return ChromaDBProvider(
        persist_directory=app_settings.chromadb_persist_dir,
        collection_name=app_settings.chromadb_collection,
        dimension=app_settings.vector_dimension,
    )


async def _handle_upload(args: argparse.Namespace, app_settings: Settings) -> int:
    import httpx

    from resume_ats.providers.document.pdf_text_extractor import PDFTextExtractor
    from resume_ats.providers.embedding.openai_embedding_provider import (
        OpenAIEmbeddingProvider,
    )
    from resume_ats.providers.profile.github_provider import GitHubProfileProvider
    from resume_ats.services.chunker import TextChunker
    from resume_ats.services.ingestion_service import IngestionService
    from resume_ats.services.skill_extractor import SkillExtractor

    path = Path(args.file)
    if not path.is_file():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 1

    print(f"Uploading resume: {args.name} ({args.role})")
    print(f"  File:   {path}")
    print(f"  GitHub: {args.github}")

    async with httpx.AsyncClient(timeout=30.0) as http_client:
        service = IngestionService(
            skill_extractor=SkillExtractor(
                profile_provider=GitHubProfileProvider(
                    http_client=http_client,
                    token=app_settings.get_github_token(),
                    base_url=app_settings.github_api_base_url,
                )
            ),
            text_extractor=PDFTextExtractor(),
            chunker=TextChunker(
                chunk_size=app_settings.chunk_size,
                chunk_overlap=app_settings.chunk_overlap,
            ),
            embedding_provider=OpenAIEmbeddingProvider(settings=app_settings),
            vector_store=_build_vector_store(app_settings),
        )
        try:
            result = await service.ingest_resume(
                document=path.read_bytes(),
                name=args.name,
                role=args.role,
                github_username=args.github,
            )
        except ATSError as exc:
            print(f"\nUpload failed: {exc}", file=sys.stderr)
            return 1

    print("\nUpload complete:")
    print(f"  Skills:      {', '.join(result.skills) or '(none)'}")
    print(f"  Fragments:   {result.fragments_stored}")
    print(f"  Document ID: {result.document_id[:12]}")
    print(f"  Time:        {result.ingestion_time:.2f}s")
    return 0


async def _handle_query(args: argparse.Namespace, app_settings: Settings) -> int:
    from resume_ats.models.conversation import ConversationTurn
    from resume_ats.providers.embedding.openai_embedding_provider import (
        OpenAIEmbeddingProvider,
    )
    from resume_ats.providers.llm.openai_provider import OpenAILLMProvider
    from resume_ats.services.prompt_assembler import PromptAssembler
    from resume_ats.services.query_service import QueryService

    service = QueryService(
        assembler=PromptAssembler(
            embedding_provider=OpenAIEmbeddingProvider(settings=app_settings),
            vector_store=_build_vector_store(app_settings),
            variant=app_settings.evaluation_prompt_variant,
            top_k=app_settings.retrieval_top_k,
        ),
        llm=OpenAILLMProvider(settings=app_settings),
        temperature=app_settings.generation_temperature,
    )
    try:
        reply = await service.answer([ConversationTurn(role="user", content=args.question)])
    except ATSError as exc:
        print(f"Query failed: {exc}", file=sys.stderr)
        return 1

    print(reply)
    return 0


async def _handle_stats(app_settings: Settings) -> int:
    vector_store = _build_vector_store(app_settings)
    total = await vector_store.count()

    print("Resume Store Statistics")
    print("=" * 40)
    print(f"  Collection:  {app_settings.chromadb_collection}")
    print(f"  Directory:   {app_settings.chromadb_persist_dir}")
    print(f"  Fragments:   {total}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-ats",
        description="Manage and query the résumé fragment store.",
    )
    subparsers = parser.add_subparsers(dest="command")

    upload_parser = subparsers.add_parser("upload", help="Ingest a PDF résumé")
    upload_parser.add_argument("--file", required=True, help="Path to the PDF résumé")
    upload_parser.add_argument("--name", required=True, help="Candidate name")
    upload_parser.add_argument("--role", required=True, help="Target role")
    upload_parser.add_argument("--github", required=True, help="GitHub username")

    query_parser = subparsers.add_parser("query", help="Evaluate stored résumés")
    query_parser.add_argument("question", help="Job description or hiring question")

    subparsers.add_parser("stats", help="Show the number of stored fragments")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.  Exits with 0 on success and 1 on any failure."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    app_settings = Settings()
    configure_logging(log_level="WARNING")

    try:
        if args.command == "upload":
            exit_code = asyncio.run(_handle_upload(args, app_settings))
        elif args.command == "query":
            exit_code = asyncio.run(_handle_query(args, app_settings))
        elif args.command == "stats":
            exit_code = asyncio.run(_handle_stats(app_settings))
        else:
            parser.print_help()
            exit_code = 1
    except ATSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1
    except ValueError as exc:
        # Invalid settings, e.g. CHUNK_OVERLAP >= CHUNK_SIZE.
        print(f"Configuration error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
