"""
Mentor records held in the document store.

Exports:
    MentorRecord: Typed view of a mentor document
    MentorRepository: Lookup and processor-account linking
    get_mentor_repository: Repository over the process-wide store
"""

from .records import MentorRecord, MentorRepository, get_mentor_repository

__all__ = [
    "MentorRecord",
    "MentorRepository",
    "get_mentor_repository",
]
