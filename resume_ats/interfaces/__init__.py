"""Public interface definitions for all external service providers.

Every external collaborator is accessed through the abstract base classes
in this package.  Concrete adapters implement them and are injected at
startup in ``resume_ats/main.py``; tests inject in-memory fakes instead.

CONCRETE PROVIDER MAP:
    Interface              ->  Concrete implementation (in resume_ats/providers/)
    IEmbeddingProvider     ->  OpenAIEmbeddingProvider
    ILLMProvider           ->  OpenAILLMProvider
    IProfileProvider       ->  GitHubProfileProvider
    ITextExtractor         ->  PDFTextExtractor
    IVectorStoreProvider   ->  ChromaDBProvider
"""

from resume_ats.interfaces.embedding_provider import IEmbeddingProvider
from resume_ats.interfaces.llm_provider import ILLMProvider
from resume_ats.interfaces.profile_provider import IProfileProvider
from resume_ats.interfaces.text_extractor import ITextExtractor
from resume_ats.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "IEmbeddingProvider",
    "ILLMProvider",
    "IProfileProvider",
    "ITextExtractor",
    "IVectorStoreProvider",
]
