"""Unit tests for the tool catalog (launchts.scaffolder.registry)."""

from __future__ import annotations

import dataclasses

import pytest

from launchts.options import ToolOptions
from launchts.scaffolder.registry import (
    HOOK_PATH,
    TOOL_ORDER,
    TOOL_REGISTRY,
    ToolId,
    enabled_tools,
)

pytestmark = pytest.mark.unit


class TestRegistry:
    def test_every_tool_has_a_descriptor(self):
        assert set(TOOL_REGISTRY) == set(ToolId)
        assert set(TOOL_ORDER) == set(ToolId)

    def test_fold_order(self):
        assert TOOL_ORDER == (ToolId.NODEMON, ToolId.ESLINT, ToolId.PRETTIER, ToolId.HUSKY)

    def test_tool_ids_match_option_fields(self):
        for tool in ToolId:
            assert tool.value in ToolOptions.model_fields

    def test_script_names_never_collide(self):
        seen: set[str] = {"build"}
        for tool in TOOL_ORDER:
            scripts = set(TOOL_REGISTRY[tool].scripts)
            assert not scripts & seen
            seen |= scripts

    def test_every_script_is_documented(self):
        for descriptor in TOOL_REGISTRY.values():
            assert set(descriptor.script_docs) == set(descriptor.scripts)

    def test_descriptors_are_immutable(self):
        descriptor = TOOL_REGISTRY[ToolId.ESLINT]
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.dependencies = ()  # type: ignore[misc]
        with pytest.raises(TypeError):
            descriptor.scripts["lint"] = "rm -rf /"  # type: ignore[index]
        with pytest.raises(TypeError):
            TOOL_REGISTRY[ToolId.ESLINT] = descriptor  # type: ignore[index]

    def test_eslint_descriptor(self):
        eslint = TOOL_REGISTRY[ToolId.ESLINT]
        assert eslint.dependencies == (
            "eslint",
            "@eslint/js",
            "typescript-eslint",
            "globals",
            "eslint-config-prettier",
        )
        assert dict(eslint.scripts) == {"lint": "eslint ."}
        assert eslint.config_file == "eslint.config.js"
        assert "typescript-eslint" in eslint.config

    def test_prettier_descriptor(self):
        prettier = TOOL_REGISTRY[ToolId.PRETTIER]
        assert prettier.dependencies == ("prettier",)
        assert dict(prettier.config) == {
            "semi": True,
            "singleQuote": True,
            "trailingComma": "all",
            "printWidth": 80,
        }

    def test_husky_descriptor(self):
        husky = TOOL_REGISTRY[ToolId.HUSKY]
        assert husky.dependencies == ("husky", "lint-staged")
        assert dict(husky.scripts) == {"prepare": "husky install"}
        assert husky.config_file == HOOK_PATH == ".husky/pre-commit"
        assert husky.config_mode == 0o755
        assert husky.config.startswith("#!/bin/sh\n")
        assert "npx lint-staged" in husky.config
        assert set(husky.manifest_sections["lint-staged"]) == {"*.ts", "*.json"}

    def test_nodemon_descriptor(self):
        nodemon = TOOL_REGISTRY[ToolId.NODEMON]
        assert nodemon.dependencies == ("nodemon", "ts-node")
        assert "nodemon --watch src" in nodemon.scripts["dev"]
        assert nodemon.config_file is None


class TestEnabledTools:
    def test_none_enabled(self):
        assert enabled_tools(ToolOptions()) == []

    def test_all_enabled_in_fold_order(self):
        opts = ToolOptions(eslint=True, prettier=True, husky=True, nodemon=True)
        assert enabled_tools(opts) == list(TOOL_ORDER)

    def test_subset_keeps_order(self):
        opts = ToolOptions(husky=True, nodemon=True)
        assert enabled_tools(opts) == [ToolId.NODEMON, ToolId.HUSKY]
