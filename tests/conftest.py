"""Shared fixtures for errata tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable


SPRING_POST = """---
layout: post
title: "Spring Security: 403 Forbidden on POST requests"
tags: [spring, java, security]
---

CSRF protection is enabled by default, so every `POST` needs a token.

```java
http.csrf().disable();
```
"""

REACT_POST = """---
layout: post
title: "React: Too many re-renders"
tags:
  - react
  - javascript
---

Calling `setState` during render loops forever.
"""

PIP_POST = """---
layout: post
title: "pip: externally-managed-environment"
tags: [python]
---

Use a virtual environment instead of the system interpreter.
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ERRATA_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("ERRATA_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    root = tmp_path / "blog"
    (root / "_posts").mkdir(parents=True)
    return root


@pytest.fixture
def posts_dir(site_root: Path) -> Path:
    return site_root / "_posts"


@pytest.fixture
def write_post(posts_dir: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = posts_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_corpus(write_post) -> list[Path]:
    return [
        write_post("2023-03-01-spring-security-403.md", SPRING_POST),
        write_post("2023-05-10-react-too-many-rerenders.md", REACT_POST),
        write_post("2022-11-20-pip-externally-managed.md", PIP_POST),
    ]
