#!/usr/bin/env python3
"""
Purpose:
    FileSystemContentSource: the host-facing content source backed by files
    under a project root. Documents come from `content_dir`, assets from the
    configured assets directory; each read converts files fresh through the
    forward converter, and updates round-trip through the reverse mapper and
    the field-path editor.

    One bad file never aborts a batch read: read/parse failures and
    unsupported field types are logged and the file is left out.
"""
from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field

from fscontent.core.config import AssetsConfig
from fscontent.core.constants import CONTENT_SOURCE_TYPE
from fscontent.core.convert.assemble import convert_asset, convert_document
from fscontent.core.document.document import Asset, Document
from fscontent.core.document.fields import WireModel
from fscontent.core.document.update import UpdateOperation, update_operations_adapter
from fscontent.core.exceptions import ContentSourceError
from fscontent.core.schema.model import Model
from fscontent.core.schema.registry import ModelRegistry
from fscontent.core.storage.field_path import apply_update_operations
from fscontent.core.storage.files import list_files, read_record, write_record

_module_logger = logging.getLogger(__name__)

NOT_IMPLEMENTED_MESSAGE = "Method not implemented."


# --- Change events --- #

class ContentChangeEvent(WireModel):
    documents: List[Document] = Field(default_factory=list)
    assets: List[Asset] = Field(default_factory=list)
    deleted_document_ids: List[str] = Field(default_factory=list, alias="deletedDocumentIds")
    deleted_asset_ids: List[str] = Field(default_factory=list, alias="deletedAssetIds")


class FilesChangeResult(WireModel):
    schema_changed: Optional[bool] = Field(default=None, alias="schemaChanged")
    content_change_event: Optional[ContentChangeEvent] = Field(default=None, alias="contentChangeEvent")


ModelMapProvider = Callable[[], Mapping[str, Model]]
ContentChangeHandler = Callable[[ContentChangeEvent], None]


# --- Content source --- #

class FileSystemContentSource:
    """
    Content source over a directory tree.

    Args:
        root_dir:    project root; document ids are paths relative to it
        content_dir: directory (relative to root) holding content files
        models:      content models served by `get_models`
        assets:      assets configuration (directory + public url prefix)
    """

    def __init__(
        self,
        *,
        root_dir: Union[str, Path],
        content_dir: str,
        models: Sequence[Model] = (),
        assets: Optional[AssetsConfig] = None,
    ):
        self.root_dir = Path(root_dir)
        self.content_dir = content_dir
        self.models = list(models)
        self.assets = assets or AssetsConfig()
        self._logger: logging.Logger = _module_logger
        self._get_model_map: Optional[ModelMapProvider] = None
        self._on_content_change: Optional[ContentChangeHandler] = None

    # --- Identity --- #

    def get_content_source_type(self) -> str:
        return CONTENT_SOURCE_TYPE

    def get_project_id(self) -> str:
        return self.content_dir

    def get_project_environment(self) -> str:
        return ""

    def get_project_manage_url(self) -> str:
        return ""

    # --- Lifecycle --- #

    def init(self, logger: Optional[logging.Logger] = None) -> None:
        """Attach a host logger (defaults to this module's logger)."""
        self._logger = logger or _module_logger

    def reset(self) -> None:
        pass

    def has_access(self, user_context: Any = None) -> Dict[str, bool]:
        return {"has_connection": True, "has_permissions": True}

    # --- Schema --- #

    def get_models(self) -> List[Model]:
        return list(self.models)

    def get_model_map(self) -> ModelRegistry:
        return ModelRegistry(self.models)

    def get_locales(self) -> List[str]:
        return []

    # --- Documents --- #

    def get_documents(self, models: Optional[Mapping[str, Model]] = None) -> List[Document]:
        """Convert every readable file under `content_dir`; bad files are logged and skipped."""
        models = self.get_model_map() if models is None else models
        documents: List[Document] = []
        for rel_path in list_files(self.content_path):
            document = self._load_document(self._content_id(rel_path), models)
            if document is not None:
                documents.append(document)
        return documents

    def get_document(self, document_id: str, models: Optional[Mapping[str, Model]] = None) -> Optional[Document]:
        """Convert a single document by id (path relative to the root), or None."""
        models = self.get_model_map() if models is None else models
        return self._load_document(document_id, models)

    def update_document(
        self,
        document: Document,
        operations: Iterable[Union[UpdateOperation, Mapping[str, Any]]],
        models: Optional[Mapping[str, Model]] = None,
    ) -> Document:
        """
        Apply update operations to the document's file and return a fresh Document.

        Read → mutate → write → reconvert is not atomic; concurrent updates of
        the same file are not synchronized here. The input document is returned
        if the rewritten record no longer converts.
        """
        models = self.get_model_map() if models is None else models
        file_path = self.root_dir / document.id
        record = read_record(file_path)
        updated = apply_update_operations(record, self._coerce_operations(operations), models)
        write_record(file_path, updated)
        return convert_document(document.id, file_path, updated, models) or document

    def create_document(self, *args: Any, **kwargs: Any) -> Document:
        raise NotImplementedError(NOT_IMPLEMENTED_MESSAGE)

    def delete_document(self, *args: Any, **kwargs: Any) -> None:
        raise NotImplementedError(NOT_IMPLEMENTED_MESSAGE)

    def validate_documents(self, documents: Sequence[Document] = (), assets: Sequence[Asset] = ()) -> List[str]:
        return []

    def publish_documents(self, *args: Any, **kwargs: Any) -> None:
        raise NotImplementedError(NOT_IMPLEMENTED_MESSAGE)

    # --- Assets --- #

    def get_assets(self) -> List[Asset]:
        """One Asset per file under the assets directory; ids are relative to that directory."""
        return [
            convert_asset(rel_path, self.assets_path / rel_path, self.assets.public_path)
            for rel_path in list_files(self.assets_path)
        ]

    def upload_asset(self, *args: Any, **kwargs: Any) -> Asset:
        raise NotImplementedError(NOT_IMPLEMENTED_MESSAGE)

    # --- Change notifications --- #

    def start_watching_content_updates(
        self,
        get_model_map: ModelMapProvider,
        on_content_change: Optional[ContentChangeHandler] = None,
    ) -> None:
        """Register the model-map provider (and optional change handler) used by `on_files_change`."""
        self._get_model_map = get_model_map
        self._on_content_change = on_content_change

    def stop_watching_content_updates(self) -> None:
        self._get_model_map = None
        self._on_content_change = None

    def on_files_change(self, updated_files: Iterable[str]) -> FilesChangeResult:
        """
        Build a change event for files (paths relative to the root) that changed on disk.

        Missing files become deleted ids; unreadable or unconvertible content
        files are logged and skipped. Returns an empty result until
        `start_watching_content_updates` has been called.
        """
        if self._get_model_map is None:
            return FilesChangeResult()
        models = self._get_model_map()
        updated_files = list(updated_files)
        event = ContentChangeEvent()

        for file_id in (f for f in updated_files if _is_under(f, self.content_dir)):
            if not (self.root_dir / file_id).exists():
                event.deleted_document_ids.append(file_id)
                continue
            document = self._load_document(file_id, models)
            if document is not None:
                event.documents.append(document)

        assets_dir = self.assets.directory
        for file_id in (f for f in updated_files if _is_under(f, assets_dir)):
            asset_id = PurePosixPath(file_id).relative_to(PurePosixPath(assets_dir)).as_posix()
            if not (self.root_dir / file_id).exists():
                event.deleted_asset_ids.append(asset_id)
                continue
            event.assets.append(convert_asset(asset_id, self.root_dir / file_id, self.assets.public_path))

        if self._on_content_change is not None:
            self._on_content_change(event)
        return FilesChangeResult(schema_changed=False, content_change_event=event)

    # --- Paths --- #

    @property
    def content_path(self) -> Path:
        return self.root_dir / self.content_dir

    @property
    def assets_path(self) -> Path:
        return self.root_dir / self.assets.directory

    def _content_id(self, rel_path: str) -> str:
        return (PurePosixPath(self.content_dir) / rel_path).as_posix()

    # --- Internals --- #

    def _load_document(self, document_id: str, models: Mapping[str, Model]) -> Optional[Document]:
        file_path = self.root_dir / document_id
        try:
            record = read_record(file_path)
        except (OSError, ValueError) as e:
            self._logger.warning("Error loading file %s: %s", file_path, e)
            return None
        try:
            document = convert_document(document_id, file_path, record, models)
        except ContentSourceError as e:
            self._logger.warning("Error converting file %s: %s", file_path, e)
            return None
        if document is None:
            self._logger.warning("Error converting file %s: no model for type %r", file_path, record.get("type"))
        return document

    @staticmethod
    def _coerce_operations(operations: Iterable[Union[UpdateOperation, Mapping[str, Any]]]) -> List[UpdateOperation]:
        ops = list(operations)
        if all(isinstance(op, BaseModel) for op in ops):
            return ops
        return update_operations_adapter.validate_python(
            [op.model_dump(by_alias=True) if isinstance(op, BaseModel) else op for op in ops]
        )


def _is_under(file_id: str, directory: str) -> bool:
    """True if the root-relative `file_id` lies inside `directory`."""
    prefix = PurePosixPath(directory).parts
    parts = PurePosixPath(file_id).parts
    return len(parts) > len(prefix) and parts[:len(prefix)] == prefix
