"""
Pytest configuration and shared report fixtures.

Usage:
    pytest tests/ -v
"""

import copy
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import settings


ESLINT_PLUGIN_REPORT = {
    "slug": "eslint",
    "title": "ESLint",
    "icon": "eslint",
    "description": "Official ESLint plugin",
    "packageName": "@example/eslint-plugin",
    "version": "0.1.0",
    "date": "2024-01-01T00:00:00Z",
    "duration": 420,
    "audits": [
        {
            "slug": "no-any",
            "title": "Disallow any",
            "docsUrl": "https://example.com/rules/no-any",
            "value": 3,
            "score": 0.0,
            "displayValue": "3 errors",
            "details": {
                "issues": [
                    {
                        "message": "Unexpected any",
                        "severity": "error",
                        "source": {"file": "src/index.ts", "position": {"startLine": 4}},
                    },
                ],
            },
        },
        {"slug": "no-unused-vars", "title": "No unused vars", "value": 0, "score": 1},
        {"slug": "prefer-const", "title": "Prefer const", "value": 0, "score": 1},
    ],
    "groups": [
        {
            "slug": "problems",
            "title": "Problems",
            "refs": [
                {"slug": "no-any", "weight": 1},
                {"slug": "no-unused-vars", "weight": 1},
            ],
        },
    ],
}

LIGHTHOUSE_PLUGIN_REPORT = {
    "slug": "lighthouse",
    "title": "Lighthouse",
    "icon": "lighthouse",
    "date": "2024-01-01T00:00:01Z",
    "duration": 1500,
    "audits": [
        {"slug": "largest-contentful-paint", "title": "LCP", "value": 2100, "score": 0.5},
    ],
}

REPORT = {
    "packageName": "@example/cli",
    "version": "1.0.0",
    "date": "2024-01-01T00:00:00Z",
    "duration": 2000,
    "categories": [
        {
            "slug": "code-style",
            "title": "Code style",
            "refs": [
                {"slug": "problems", "weight": 1, "type": "group", "plugin": "eslint"},
                {"slug": "prefer-const", "weight": 0, "type": "audit", "plugin": "eslint"},
            ],
        },
        {
            "slug": "performance",
            "title": "Performance",
            "docsUrl": "",
            "refs": [
                {"slug": "largest-contentful-paint", "weight": 3, "type": "audit", "plugin": "lighthouse"},
                {"slug": "no-any", "weight": 1, "type": "audit", "plugin": "eslint"},
            ],
        },
    ],
    "plugins": [ESLINT_PLUGIN_REPORT, LIGHTHOUSE_PLUGIN_REPORT],
}

PLUGIN_CONFIG = {
    "slug": "eslint",
    "title": "ESLint",
    "icon": "eslint",
    "runner": {"command": "node", "args": ["bin.js"], "outputFile": "  tmp/eslint.json  "},
    "audits": [
        {"slug": "no-any", "title": "Disallow any"},
        {"slug": "no-unused-vars", "title": "No unused vars"},
    ],
    "groups": [
        {"slug": "problems", "title": "Problems", "refs": [{"slug": "no-any", "weight": 1}]},
    ],
}

CORE_CONFIG = {
    "persist": {"outputDir": "tmp", "filename": "report", "format": ["json", "md"]},
    "upload": {
        "server": "https://portal.example.com/graphql",
        "apiKey": "secret",
        "organization": "example",
        "project": "web-app",
    },
    "plugins": [PLUGIN_CONFIG],
    "categories": [
        {
            "slug": "bugs",
            "title": "Bugs",
            "refs": [{"slug": "problems", "weight": 1, "type": "group", "plugin": "eslint"}],
        },
    ],
}


@pytest.fixture
def report():
    return copy.deepcopy(REPORT)


@pytest.fixture
def plugin_report():
    return copy.deepcopy(ESLINT_PLUGIN_REPORT)


@pytest.fixture
def plugin_config():
    return copy.deepcopy(PLUGIN_CONFIG)


@pytest.fixture
def core_config():
    return copy.deepcopy(CORE_CONFIG)


@pytest.fixture
def limits():
    """Restore schema limits after a test overrides them."""
    saved = (settings.MAX_SLUG_LENGTH, settings.MAX_TITLE_LENGTH, settings.MAX_DESCRIPTION_LENGTH)
    yield settings
    settings.MAX_SLUG_LENGTH, settings.MAX_TITLE_LENGTH, settings.MAX_DESCRIPTION_LENGTH = saved
