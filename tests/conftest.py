"""Shared fixtures for the guidetree test suite.

The ``sample_guide_text`` fixture holds a short Docker guide in canonical
text form. It exercises every block kind, nests sections two levels deep and
repeats the ``Networking`` heading under different parents so lookup order
and anchor de-duplication can be asserted.
"""

from __future__ import annotations

import pytest

from guidetree import Document, read_document

SAMPLE_GUIDE = """\
---
title: Docker guide
---

# Architecture

Docker uses a client-server model.
The daemon builds and runs containers.

## Images

$ docker build -t app .
$ docker images

```dockerfile
FROM python:3.12-slim
RUN pip install app
```

## Networking

- bridge
- host
- none

# Compose

```yaml
services:
  web:
    image: app
```

## Networking

Compose creates a default network per project.
"""


@pytest.fixture
def sample_guide_text() -> str:
    """Return the sample Docker guide in canonical text form."""
    return SAMPLE_GUIDE


@pytest.fixture
def sample_document(sample_guide_text: str) -> Document:
    """Return the sample Docker guide assembled into a Document."""
    return read_document(sample_guide_text)
