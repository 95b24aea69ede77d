"""
PromptEditor — single-document editor with a bounded, named version history.

Quick start:

    from prompteditor.documents import DocumentPersistence, EditorSession
    from prompteditor.storage import MemoryStore

    session = EditorSession(DocumentPersistence(MemoryStore()))
    store = session.open()
    store.edit_content("# Hello World")
    store.save_version()
"""

__version__ = "1.0.0"
__all__ = ["documents", "engine", "storage", "utilities"]
