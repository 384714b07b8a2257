"""Loading of exported data files into import datasets."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.import_dataset import ImportDataset, RelationalImportDataset


# Pydantic models describing the export file formats
class ImportDataFile(BaseModel):
    """Bare structured dataset as written by the exporter."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    messages: Optional[List[Dict[str, Any]]] = None
    session_groups: Optional[List[Dict[str, Any]]] = Field(
        default=None, alias="sessionGroups"
    )
    sessions: Optional[List[Dict[str, Any]]] = None
    topics: Optional[List[Dict[str, Any]]] = None
    settings: Optional[Dict[str, Any]] = None

    def to_dataset(self) -> ImportDataset:
        return ImportDataset(
            messages=self.messages,
            session_groups=self.session_groups,
            sessions=self.sessions,
            topics=self.topics,
        )


class ConfigExportFile(BaseModel):
    """Config export envelope whose state holds the dataset."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    export_type: Optional[str] = Field(default=None, alias="exportType")
    state: ImportDataFile
    version: Optional[int] = None


class PgExportFile(BaseModel):
    """Relational export: rows keyed by table name."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: Dict[str, List[Dict[str, Any]]]
    mode: Optional[str] = None
    schema_hash: Optional[str] = Field(default=None, alias="schemaHash")

    def to_dataset(self) -> RelationalImportDataset:
        return RelationalImportDataset(
            data=self.data, mode=self.mode, schema_hash=self.schema_hash
        )


def _read_json(path: Union[str, Path]) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_data_file(path: Union[str, Path]) -> ImportDataFile:
    """Load a structured export, unwrapping a config export envelope if present.

    Args:
        path: Path to the JSON export file.

    Returns:
        Parsed ImportDataFile.

    Raises:
        pydantic.ValidationError: If the file does not match either format.
    """
    raw = _read_json(path)
    if isinstance(raw, dict) and "state" in raw:
        return ConfigExportFile.model_validate(raw).state
    return ImportDataFile.model_validate(raw)


def load_pg_file(path: Union[str, Path]) -> RelationalImportDataset:
    """Load a relational export file into a RelationalImportDataset."""
    return PgExportFile.model_validate(_read_json(path)).to_dataset()


def load_settings_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load application settings from a settings file or a config export.

    Raises:
        ValueError: If the file contains no settings object.
    """
    raw = _read_json(path)
    if isinstance(raw, dict) and "state" in raw:
        settings = ConfigExportFile.model_validate(raw).state.settings
    else:
        settings = raw
    if not isinstance(settings, dict):
        raise ValueError(f"No settings found in {path}")
    return settings
