"""Arrange a flat list of playlists into a folder tree."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from .model import Playlist, PlaylistFolder, PlaylistFolderItem, PlaylistFolderNode


def structurize(
    playlists: Iterable[Playlist], nodes: Iterable[PlaylistFolderNode]
) -> list[PlaylistFolderItem]:
    """Lay out playlists according to the folder hierarchy given by ``nodes``.

    Every folder yields two entries: the folder itself, placed in its parent,
    and an "up" entry inside the folder that leads back to the parent. Playlists
    not mentioned by any node end up in the root folder (id 0).
    """
    remaining = {p.id.id: p for p in playlists}
    items: list[PlaylistFolderItem] = []
    last_folder_id = 0

    def walk(children: Iterable[PlaylistFolderNode], current: int) -> None:
        nonlocal last_folder_id
        for node in children:
            _, sep, item_id = node.uri.rpartition(":")
            if not sep:
                continue
            if node.node_type == "folder":
                last_folder_id += 1
                target = last_folder_id
                name = node.name if node.name is not None else f"folder_{current}"
                items.append(PlaylistFolder(name=name, current_id=current, target_id=target))
                items.append(
                    PlaylistFolder(name=f"← {name}", current_id=target, target_id=current)
                )
                walk(node.children, target)
            else:
                playlist = remaining.pop(item_id, None)
                if playlist is not None:
                    items.append(replace(playlist, current_folder_id=current))

    walk(nodes, 0)

    items.extend(replace(p, current_folder_id=0) for p in remaining.values())
    return items