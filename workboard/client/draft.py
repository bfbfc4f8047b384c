from typing import Dict

from pydantic import BaseModel

from workboard.services.integrity import hash_document


class DocumentDraft(BaseModel):
    filename: str
    contents: bytes
    content_type: str = "application/octet-stream"
    sha256: str


class ApplicationDraft:
    """Files picked for each job requirement before the application is sent."""

    def __init__(self):
        self._docs: Dict[str, DocumentDraft] = {}

    def attach(self, requirement: str, filename: str, contents: bytes,
               content_type: str = "application/octet-stream") -> DocumentDraft:
        doc = DocumentDraft(
            filename=filename,
            contents=contents,
            content_type=content_type,
            sha256=hash_document(contents),
        )
        self._docs[requirement] = doc
        return doc

    def remove(self, requirement: str):
        self._docs.pop(requirement, None)

    def items(self):
        return list(self._docs.items())

    def requirements(self):
        return list(self._docs)

    def clear(self):
        self._docs.clear()

    def __len__(self):
        return len(self._docs)
