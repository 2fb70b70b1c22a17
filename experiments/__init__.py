"""Offline reranking runs and their command line interface."""
