"""Subversion repository access."""

from .svnlook import SvnLook, locate_svnlook

__all__ = ["SvnLook", "locate_svnlook"]
