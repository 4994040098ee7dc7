"""Search indexer microservice backed by Azure AI Search."""

__version__ = "1.0.0"
