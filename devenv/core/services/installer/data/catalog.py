"""
L0 Data — Built-in package catalog.

Pure data, no logic. Insertion order is menu order.
"""

from __future__ import annotations

from devenv.core.models.package import Catalog, InstallMethod, Package

_BREW = InstallMethod.PACKAGE_MANAGER
_GEM = InstallMethod.LANGUAGE_PACKAGE_MANAGER


def _pkg(pid: str, **fields) -> tuple[str, Package]:
    return pid, Package(id=pid, **fields)


BUILTIN_PACKAGES: Catalog = dict([

    # ── Ruby toolchain ──────────────────────────────────────────

    _pkg(
        "ruby",
        name="Ruby (via rbenv)",
        method=InstallMethod.VERSION_MANAGER_CUSTOM,
        dependencies=("rbenv",),
        check='rbenv global &>/dev/null && rbenv versions | grep "*" &>/dev/null',
    ),
    _pkg(
        "rbenv",
        name="rbenv (Ruby Version Manager)",
        method=_BREW,
        command="brew install rbenv",
        check="which rbenv",
        post_install=(
            'echo "If this is a new installation of rbenv, please add the following '
            'to your shell configuration (.zshrc, .bashrc, etc.):"',
            "echo 'eval \"$(rbenv init -)\"'",
            "echo \"Then restart your terminal or run 'eval \\\"$(rbenv init -)\\\"'\"",
        ),
    ),
    _pkg(
        "bundler",
        name="Bundler (Ruby Gem Manager)",
        method=_GEM,
        command="gem install bundler --no-document",
        dependencies=("ruby",),
        check="which bundle",
    ),
    _pkg(
        "rails",
        name="Ruby on Rails",
        method=_GEM,
        command="gem install rails --no-document",
        dependencies=("ruby", "bundler"),
        check="which rails",
    ),
    _pkg(
        "jekyll",
        name="Jekyll (Static Site Generator)",
        method=_GEM,
        command="gem install jekyll --no-document",
        dependencies=("ruby", "bundler"),
        check="which jekyll",
    ),
    _pkg(
        "rubocop",
        name="RuboCop - Ruby Linter",
        method=_GEM,
        command="gem install rubocop --no-document",
        dependencies=("ruby",),
        check="which rubocop",
    ),

    # ── Node ────────────────────────────────────────────────────

    _pkg(
        "nvm",
        name="Node.js Version Manager",
        method=InstallMethod.DOWNLOAD_SCRIPT,
        command="curl -o- https://raw.githubusercontent.com/nvm-sh/nvm/v0.40.3/install.sh | bash",
        check="which nvm",
        post_install=(
            "echo \"If nvm is new, please close and reopen your terminal or run "
            "'source ~/.nvm/nvm.sh' for nvm to be available.\"",
            'echo "Then you can install Node.js using: nvm install --lts"',
        ),
    ),

    # ── Homebrew formulae ───────────────────────────────────────

    _pkg(
        "luarocks",
        name="LuaRocks (Lua Package Manager)",
        method=_BREW,
        command="brew install luarocks",
        check="which luarocks",
    ),
    _pkg(
        "luajit",
        name="LuaJIT (Lua Just-In-Time Compiler)",
        method=_BREW,
        command="brew install luajit",
        check="which luajit",
    ),
    _pkg(
        "gradle",
        name="Gradle (Build Tool)",
        method=_BREW,
        command="brew install gradle",
        check="which gradle",
    ),
    _pkg(
        "node",
        name="Node.js",
        method=_BREW,
        command="brew install node",
        check="which node",
    ),
    _pkg(
        "git",
        name="Git",
        method=_BREW,
        command="brew install git",
        check="which git",
    ),
])

# Installed by the "all" menu option. node is left out: it is usually
# installed through nvm.
DEFAULT_PACKAGES: tuple[str, ...] = ("ruby", "bundler", "git")
