"""Pytest fixtures and helpers for repo-explorer tests."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

INDEX_TS = """/* eslint-disable no-console */
/**
 * Main entry point for the mock application
 */
import { Button } from './components/Button';
import { formatDate, calculateSum } from './utils/helpers';

export function main(): void {
  console.log('Hello from mock repo!');
  const button = new Button('Click me');
  button.render();

  const today = formatDate(new Date());
  console.log(`Today is: ${today}`);
}

export { Button } from './components/Button';
export { formatDate, calculateSum } from './utils/helpers';
"""

HELPERS_TS = """/**
 * Utility helper functions
 */

export function formatDate(date: Date): string {
  const year = date.getFullYear();
  const month = String(date.getMonth() + 1).padStart(2, '0');
  const day = String(date.getDate()).padStart(2, '0');
  return `${year}-${month}-${day}`;
}

export function calculateSum(numbers: number[]): number {
  return numbers.reduce((acc, num) => acc + num, 0);
}

export function capitalize(str: string): string {
  if (!str) return '';
  return str.charAt(0).toUpperCase() + str.slice(1);
}
"""

BUTTON_TS = """/**
 * A simple Button component
 */
export class Button {
  private label: string;

  constructor(label: string) {
    this.label = label;
  }

  public render(): string {
    return `<button>${this.label}</button>`;
  }
}
"""

INPUT_TS = """/**
 * A simple Input component
 */
export interface InputProps {
  placeholder?: string;
}

export class Input {
  constructor(private props: InputProps = {}) {}
}
"""

CONSTANTS_TS = """/**
 * Application constants
 */

export const APP_NAME = 'MockApp';
export const APP_VERSION = '1.0.0';
"""


def build_mock_repo(root: Path) -> Path:
    """Write the fixture tree used across the suite and return ``root``.

    Layout::

        package.json
        docs/README.md, docs/api.md
        src/index.ts
        src/components/Button.ts, Input.ts
        src/utils/constants.ts, helpers.ts
        .hidden/secret.ts          (hidden: skipped by tree/find)
        node_modules/lib/index.ts  (always skipped)
        dist/bundle.js             (skipped by grep only)
    """
    (root / "src" / "components").mkdir(parents=True)
    (root / "src" / "utils").mkdir()
    (root / "docs").mkdir()
    (root / ".hidden").mkdir()
    (root / "node_modules" / "lib").mkdir(parents=True)
    (root / "dist").mkdir()

    (root / "package.json").write_text(
        json.dumps({"name": "mock-repo", "version": "1.0.0", "main": "src/index.ts"}, indent=2) + "\n"
    )
    (root / "docs" / "README.md").write_text("# Mock repo\n\nCall formatDate to format dates.\n")
    (root / "docs" / "api.md").write_text("# API\n")
    (root / "src" / "index.ts").write_text(INDEX_TS)
    (root / "src" / "components" / "Button.ts").write_text(BUTTON_TS)
    (root / "src" / "components" / "Input.ts").write_text(INPUT_TS)
    (root / "src" / "utils" / "constants.ts").write_text(CONSTANTS_TS)
    (root / "src" / "utils" / "helpers.ts").write_text(HELPERS_TS)
    (root / ".hidden" / "secret.ts").write_text("export const formatDate = 1;\n")
    (root / "node_modules" / "lib" / "index.ts").write_text("export function formatDate() {}\n")
    (root / "dist" / "bundle.js").write_text("function formatDate(){}\n")
    return root


@pytest.fixture
def mock_repo(tmp_path: Path) -> Path:
    return build_mock_repo(tmp_path / "mock-repo")


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Clear the load_config LRU cache and reset _env before (and after) every test."""
    from repo_explorer.config import loader as config_loader
    config_loader.load_config.cache_clear()
    config_loader._env = None
    yield
    config_loader.load_config.cache_clear()
    config_loader._env = None
