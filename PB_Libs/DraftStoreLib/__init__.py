"""
DraftStoreLib - Draft persistence and export handoff

This module provides the .pbdraft file store, thumbnail rendering and the
normalized export handoff with its bill of materials.
"""

from PB_Libs.DraftStoreLib.draft_store import (
    create_draft_id,
    serialize_grid,
    deserialize_grid,
    render_thumbnail,
    build_draft,
    get_drafts_dir,
    draft_path,
    save_draft,
    normalize_draft,
    load_draft_file,
    load_draft,
    list_drafts,
    delete_draft,
    restore_session,
)
from PB_Libs.DraftStoreLib.export_handoff import (
    BeadCount,
    ExportHandoff,
    normalize_grid,
    count_beads,
    build_export_handoff,
    export_session,
)

__all__ = [
    "create_draft_id",
    "serialize_grid",
    "deserialize_grid",
    "render_thumbnail",
    "build_draft",
    "get_drafts_dir",
    "draft_path",
    "save_draft",
    "normalize_draft",
    "load_draft_file",
    "load_draft",
    "list_drafts",
    "delete_draft",
    "restore_session",
    "BeadCount",
    "ExportHandoff",
    "normalize_grid",
    "count_beads",
    "build_export_handoff",
    "export_session",
]
