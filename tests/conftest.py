"""Shared test fixtures for the starwind_mcp test suite."""

from __future__ import annotations

import pytest

from starwind_mcp.config import Settings
from starwind_mcp.models.catalog import CatalogManifest

SAMPLE_LLMS_TXT = """\
# Starwind UI

> Accessible, customizable components for Astro and Tailwind CSS.

## Getting Started

- [Installation](https://starwind.dev/docs/getting-started/installation)
- [Theming](https://starwind.dev/docs/getting-started/theming)

## Components

- [Accordion](https://starwind.dev/docs/components/accordion)
- [Button](https://starwind.dev/docs/components/button)
- [Button Group](https://starwind.dev/docs/components/button-group/)
- [Card](https://starwind.dev/docs/components/card)
- [Dialog](https://starwind.dev/docs/components/dialog)

### Button

Buttons trigger actions. Use the `variant` prop for styles.

```astro
# not a header
<Button variant="primary">Click</Button>
```

### Card

Cards group related content.

## Theming

Override CSS variables to theme components.
"""


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def llms_txt() -> str:
    return SAMPLE_LLMS_TXT


@pytest.fixture()
def manifest_data() -> dict:
    """Pro manifest as served by pro.starwind.dev (camelCase)."""
    return {
        "categories": ["hero", "footer", "pricing", "cta"],
        "totalBlocks": 4,
        "baseUrl": "https://pro.starwind.dev",
        "blocks": [
            {
                "id": "hero-01",
                "name": "Hero 01",
                "description": "Centered hero with dark gradient background",
                "categories": ["hero"],
                "keywords": ["hero", "dark", "landing"],
                "plan": "free",
                "installCommand": "npx starwind@latest add @starwind-pro/hero-01",
                "previewUrl": "/preview/hero-01",
            },
            {
                "id": "hero-02",
                "name": "Hero 02",
                "description": "Split hero with image",
                "categories": ["hero"],
                "keywords": ["hero", "image"],
                "plan": "pro",
                "installCommand": "npx starwind@latest add @starwind-pro/hero-02",
                "previewUrl": "/preview/hero-02",
            },
            {
                "id": "pricing-01",
                "name": "Pricing",
                "description": "Three-tier pricing table",
                "categories": ["pricing"],
                "keywords": ["pricing", "plans", "tiers"],
                "plan": "pro",
                "installCommand": "npx starwind@latest add @starwind-pro/pricing-01",
                "previewUrl": "/preview/pricing-01",
            },
            {
                "id": "footer-01",
                "name": "Footer 01",
                "description": "Minimal footer with dark mode links",
                "categories": ["footer"],
                "keywords": ["footer", "minimal"],
                "plan": "free",
                "installCommand": "npx starwind@latest add @starwind-pro/footer-01",
                "previewUrl": "/preview/footer-01",
            },
        ],
    }


@pytest.fixture()
def manifest(manifest_data: dict) -> CatalogManifest:
    return CatalogManifest.model_validate(manifest_data)
