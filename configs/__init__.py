"""Configuration loading for the reranking toolkit."""
