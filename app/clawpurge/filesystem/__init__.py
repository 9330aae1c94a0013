"""Filesystem locations, protection rules and deletion."""
