"""Shared fixtures: throwaway userlib folders with hand-built JARs."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Callable, Mapping

import pytest

JarFactory = Callable[..., Path]


def manifest_text(headers: Mapping[str, str]) -> str:
    """Render manifest headers the way ``jar`` writes them (CRLF line ends)."""

    lines = ["Manifest-Version: 1.0"]
    lines.extend(f"{key}: {value}" for key, value in headers.items())
    return "\r\n".join(lines) + "\r\n"


def pom_text(group_id: str, artifact_id: str, version: str) -> str:
    return f"#Generated by Maven\ngroupId={group_id}\nartifactId={artifact_id}\nversion={version}\n"


def write_jar(path: Path, entries: Mapping[str, str | bytes]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for name, payload in entries.items():
            archive.writestr(name, payload)
    return path


@pytest.fixture
def userlib(tmp_path: Path) -> Path:
    folder = tmp_path / "userlib"
    folder.mkdir()
    return folder


@pytest.fixture
def make_jar(userlib: Path) -> JarFactory:
    """Build a JAR inside the userlib folder.

    ``manifest`` and ``pom`` are shortcuts for the two metadata entries;
    ``entries`` adds arbitrary archive members.
    """

    def _make(
        name: str,
        *,
        manifest: Mapping[str, str] | None = None,
        pom: tuple[str, str, str] | None = None,
        entries: Mapping[str, str | bytes] | None = None,
    ) -> Path:
        members: dict[str, str | bytes] = {}
        if manifest is not None:
            members["META-INF/MANIFEST.MF"] = manifest_text(manifest)
        if pom is not None:
            group_id, artifact_id, version = pom
            members[f"META-INF/maven/{group_id}/{artifact_id}/pom.properties"] = pom_text(*pom)
        members.update(entries or {})
        return write_jar(userlib / name, members)

    return _make
