"""NLP collaborators (entity tagging and chunking).

NLTK is imported lazily, only when a default implementation is instantiated,
so the rest of the package stays import-safe without NLTK data installed.
"""
