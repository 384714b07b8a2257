"""Datasets handed to the backend importer."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ImportDataset:
    """A structured bundle of chat data.

    Attributes:
        messages: Chat messages, or None when absent.
        session_groups: Session groups (wire name sessionGroups).
        sessions: Chat sessions.
        topics: Conversation topics.
    """

    messages: Optional[List[dict]] = None
    session_groups: Optional[List[dict]] = None
    sessions: Optional[List[dict]] = None
    topics: Optional[List[dict]] = None

    def unit_count(self) -> int:
        """Count importable records; absent sequences contribute 0."""
        return sum(
            len(items or [])
            for items in (
                self.messages,
                self.session_groups,
                self.sessions,
                self.topics,
            )
        )

    def to_payload(self) -> Dict[str, Any]:
        """Convert dataset to its wire form, omitting absent sequences."""
        payload = {
            "messages": self.messages,
            "sessionGroups": self.session_groups,
            "sessions": self.sessions,
            "topics": self.topics,
        }
        return {key: value for key, value in payload.items() if value is not None}


@dataclass
class RelationalImportDataset:
    """Rows keyed by table name.

    Attributes:
        data: Mapping of table name to its rows.
        mode: Database flavour the export came from ('pglite' or 'postgres').
        schema_hash: Hash of the schema the rows were exported with.
    """

    data: Dict[str, List[dict]] = field(default_factory=dict)
    mode: Optional[str] = None
    schema_hash: Optional[str] = None

    def unit_count(self) -> int:
        """Count rows across all tables."""
        return sum(len(rows) for rows in self.data.values())

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"data": self.data}
        if self.mode is not None:
            payload["mode"] = self.mode
        if self.schema_hash is not None:
            payload["schemaHash"] = self.schema_hash
        return payload
