"""Data model shared by the reader, classifier, auditor, and executor."""
