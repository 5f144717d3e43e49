"""Pre-publication checks for the habitica-mcp distribution.

Run from the project root (``habitica-mcp-publish-check``). Verifies that the
files a release needs are present and that ``pyproject.toml`` carries the
metadata an index upload expects, then exits 1 if anything is missing.
"""

import os
import platform
import sys
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from habitica_mcp.i18n import DEFAULT_LANGUAGE, Translator

REQUIRED_FILES: tuple[tuple[str, str, str], ...] = (
    ("pyproject.toml", "Package configuration", "包配置"),
    ("README.md", "Project documentation", "项目文档"),
    ("LICENSE", "License file", "许可证文件"),
    ("src/habitica_mcp/main.py", "Main entry point", "主入口文件"),
)

REQUIRED_PROJECT_FIELDS = ("name", "version", "description", "authors", "license", "scripts")

PLACEHOLDER_AUTHOR = "Your Name"
PLACEHOLDER_REPOSITORY = "yourusername"

Printer = Callable[[str], None]


def check_file(root: Path, relative: str, label: str, t: Translator, out: Printer) -> bool:
    """Report whether ``relative`` exists under ``root``."""
    if (root / relative).exists():
        out(f"✅ {label}: {relative}")
        return True
    out(f"❌ {label}: {relative} ({t.t('missing', '缺失')})")
    return False


def _placeholder_problems(project: dict[str, Any], t: Translator) -> list[str]:
    problems = []
    for author in project.get("authors") or []:
        if isinstance(author, dict) and author.get("name") == PLACEHOLDER_AUTHOR:
            problems.append(
                t.t(
                    f"authors.name needs updating: {author['name']}",
                    f"authors.name 需要更新：{author['name']}",
                )
            )
    for label, url in (project.get("urls") or {}).items():
        if PLACEHOLDER_REPOSITORY in str(url):
            problems.append(
                t.t(f"urls.{label} needs updating: {url}", f"urls.{label} 需要更新：{url}")
            )
    return problems


def check_pyproject(root: Path, t: Translator, out: Printer) -> bool:
    """Check the ``[project]`` table for required and placeholder metadata."""
    out(t.t("\n📦 pyproject.toml checks:", "\n📦 pyproject.toml 检查："))
    try:
        with (root / "pyproject.toml").open("rb") as f:
            project = tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError) as error:
        out(t.t(f"❌ pyproject.toml parse error: {error}", f"❌ pyproject.toml 解析错误：{error}"))
        return False

    valid = True
    for field in REQUIRED_PROJECT_FIELDS:
        if project.get(field):
            out(f"✅ {field}: {project[field]!r}")
        else:
            out(f"❌ {field}: {t.t('missing', '缺失')}")
            valid = False

    for problem in _placeholder_problems(project, t):
        out(f"⚠️  {problem}")
        valid = False
    return valid


def run_checks(root: Path, t: Translator, out: Printer = print) -> bool:
    """Run every check against ``root`` and print a summary.

    Returns:
        bool: True when the project is ready to publish
    """
    out(t.t("🔍 Pre-publish checks\n", "🔍 发布前检查\n"))

    out(t.t("📄 Required files:", "📄 必要文件检查："))
    results = [check_file(root, path, t.t(en, zh), t, out) for path, en, zh in REQUIRED_FILES]
    results.append(check_pyproject(root, t, out))

    out(t.t("\n🔧 Environment:", "\n🔧 环境检查："))
    python_version = platform.python_version()
    out(t.t(f"✅ Python version: {python_version}", f"✅ Python 版本：{python_version}"))

    out("\n" + "=" * 50)
    ready = all(results)
    if ready:
        out(t.t("🎉 All checks passed! Ready to publish", "🎉 所有检查通过！可以发布"))
        out(t.t("\n📝 Publish steps:", "\n📝 发布步骤："))
        out("1. python -m build")
        out("2. python -m twine upload dist/*")
    else:
        out(t.t("⚠️  Fix the problems above before publishing", "⚠️  请修复上述问题后再发布"))
    return ready


def main() -> None:
    """Console entry point: check the current directory."""
    language = os.environ.get("MCP_LANG") or os.environ.get("LANG") or DEFAULT_LANGUAGE
    if not run_checks(Path.cwd(), Translator(language)):
        sys.exit(1)


if __name__ == "__main__":
    main()
