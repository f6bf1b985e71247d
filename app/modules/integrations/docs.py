"""
Google Docs export of a shoot plan.

The document is rebuilt from scratch on every export: existing body content
is deleted and the rendered sections are inserted in one batchUpdate.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from app.core.exceptions import IntegrationError
from app.modules.costumes.schemas import CostumeResponse
from app.modules.equipment.schemas import EquipmentResponse
from app.modules.integrations.google_auth import GoogleApiService
from app.modules.locations.schemas import LocationResponse
from app.modules.props.schemas import PropResponse
from app.modules.shoots.schemas import ShootResponse, ParticipantResponse, ReferenceResponse

DOCS_API = "https://docs.googleapis.com/v1/documents"
DOC_URL = "https://docs.google.com/document/d/{doc_id}/edit"


@dataclass
class ShootDocument:
    shoot: ShootResponse
    location: Optional[LocationResponse] = None
    participants: List[ParticipantResponse] = field(default_factory=list)
    equipment: List[EquipmentResponse] = field(default_factory=list)
    props: List[PropResponse] = field(default_factory=list)
    costumes: List[CostumeResponse] = field(default_factory=list)
    references: List[ReferenceResponse] = field(default_factory=list)


def _numbered(items: List[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def render_sections(document: ShootDocument) -> List[Tuple[str, str]]:
    """(heading, body) pairs in document order; empty sections are left out"""
    shoot = document.shoot
    details = [f"Status: {shoot.status.capitalize()}"]
    if shoot.date:
        details.append(f"Date: {shoot.date:%A, %B} {shoot.date.day}, {shoot.date.year}")
    if shoot.time:
        details.append(f"Time: {shoot.time}")
    if shoot.duration_minutes:
        details.append(f"Duration: {shoot.duration_minutes // 60}h {shoot.duration_minutes % 60}m")
    if document.location:
        details.append(f"Location: {document.location.name}")
        if document.location.address:
            details.append(f"Address: {document.location.address}")
    elif shoot.location_notes:
        details.append(f"Location: {shoot.location_notes}")

    sections = [("Shoot Details", "\n".join(details))]
    if shoot.description:
        sections.append(("Description", shoot.description))
    if document.participants:
        sections.append(("Participants", "\n".join(
            f"• {p.name} - {p.role}" + (f" ({p.email})" if p.email else "")
            for p in document.participants
        )))
    if document.equipment:
        sections.append(("Equipment", "\n".join(
            f"• {e.name}" + (f" ({e.category})" if e.category else "")
            for e in document.equipment
        )))
    if document.props:
        sections.append(("Props", "\n".join(f"• {p.name}" for p in document.props)))
    if document.costumes:
        sections.append(("Characters/Costumes", "\n".join(
            f"• {c.character_name}" + (f" - {c.series}" if c.series else "")
            for c in document.costumes
        )))

    images = [r.url for r in document.references if r.type == "image"]
    instagram = [r.url for r in document.references if r.type == "instagram"]
    links = [r.url for r in document.references if r.type == "link"]
    if images:
        sections.append(("Reference Images", _numbered(images)))
    if instagram:
        sections.append(("Instagram References", _numbered(instagram)))
    if links:
        sections.append(("Reference Links", _numbered(links)))
    if shoot.instagram_links:
        sections.append(("Instagram Links", _numbered(shoot.instagram_links)))
    return sections


def _doc_length(text: str) -> int:
    # Docs indexes count UTF-16 code units
    return len(text.encode("utf-16-le")) // 2


def build_requests(title: str, sections: List[Tuple[str, str]]) -> List[Dict[str, Any]]:
    requests: List[Dict[str, Any]] = []
    index = 1

    def insert(text: str, style: Optional[str] = None) -> None:
        nonlocal index
        requests.append({"insertText": {"location": {"index": index}, "text": text}})
        if style:
            requests.append({
                "updateParagraphStyle": {
                    "range": {"startIndex": index, "endIndex": index + _doc_length(text)},
                    "paragraphStyle": {"namedStyleType": style},
                    "fields": "namedStyleType",
                }
            })
        index += _doc_length(text)

    insert(f"{title}\n", "TITLE")
    for heading, body in sections:
        insert(f"\n{heading}\n", "HEADING_2")
        insert(f"{body}\n", "NORMAL_TEXT")
    return requests


class GoogleDocsService(GoogleApiService):
    scopes = (
        "https://www.googleapis.com/auth/documents",
        "https://www.googleapis.com/auth/drive.file",
    )
    label = "Google Docs"
    fallback = "Copy the shoot details manually"

    def _create_document(self, title: str) -> str:
        response = self._request("POST", DOCS_API, json={"title": title})
        self._raise_for_status(response, "create document")
        doc_id = response.json().get("documentId")
        if not doc_id:
            raise IntegrationError("Docs did not return a document id", fallback=self.fallback)
        return doc_id

    def _clear_document(self, doc_id: str) -> None:
        response = self._request("GET", f"{DOCS_API}/{doc_id}")
        self._raise_for_status(response, "load document")
        content = (response.json().get("body") or {}).get("content") or []
        end_index = content[-1].get("endIndex", 1) if content else 1
        # The final newline of a document can never be deleted
        if end_index > 2:
            self._batch_update(doc_id, [{
                "deleteContentRange": {"range": {"startIndex": 1, "endIndex": end_index - 1}}
            }])

    def _batch_update(self, doc_id: str, requests: List[Dict[str, Any]]) -> None:
        response = self._request("POST", f"{DOCS_API}/{doc_id}:batchUpdate", json={"requests": requests})
        self._raise_for_status(response, "write document")

    def export_shoot(self, document: ShootDocument, doc_id: Optional[str] = None) -> Dict[str, str]:
        """Write the shoot plan to doc_id, or a new document when none exists yet"""
        title = document.shoot.title
        if doc_id:
            self._clear_document(doc_id)
        else:
            doc_id = self._create_document(f"{title} - Shoot Plan")
        self._batch_update(doc_id, build_requests(title, render_sections(document)))
        return {"doc_id": doc_id, "doc_url": DOC_URL.format(doc_id=doc_id)}
