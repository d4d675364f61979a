# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Image listing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dock_wire._request import build_query
from dock_wire.api._common import check_status, decode_json_list, is_valid_json
from dock_wire.types import ImageSummary

if TYPE_CHECKING:
    from dock_wire.client import EngineClient


def list_images(
    client: EngineClient,
    filters: str | None = None,
    *,
    all_images: bool = False,
) -> list[ImageSummary]:
    """List local images.

    Only top-level images are listed unless *all_images* is set.

    Args:
        client: Connected engine client.
        filters: JSON-encoded filter map, e.g. ``{"dangling": ["true"]}``.
        all_images: Include intermediate layers.

    Raises:
        ValueError: *filters* is not valid JSON.

    """
    if filters and not is_valid_json(filters):
        msg = f"The provided filter is not a valid JSON: {filters}"
        raise ValueError(msg)

    query = build_query({"all": True if all_images else None, "filters": filters or None})
    response = client.send("/images/json", "GET", query)
    check_status(response, 200)
    return [_image_summary(item) for item in decode_json_list(response)]


def _image_summary(data: dict[str, Any]) -> ImageSummary:
    return ImageSummary(
        id=str(data.get("Id", "")),
        repo_tags=tuple(data.get("RepoTags") or ()),
        parent_id=str(data.get("ParentId", "")),
        repo_digests=tuple(data.get("RepoDigests") or ()),
        created=int(data.get("Created", 0)),
        size=int(data.get("Size", 0)),
        virtual_size=int(data.get("VirtualSize", 0)),
        shared_size=int(data.get("SharedSize", -1)),
        labels=dict(data.get("Labels") or {}),
        containers=int(data.get("Containers", -1)),
    )
