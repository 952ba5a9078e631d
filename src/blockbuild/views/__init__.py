"""Arcade views."""

from blockbuild.views.build_view import BuildView

__all__ = ["BuildView"]
