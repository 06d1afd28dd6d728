"""Workflow entry points for the access rights check."""

from .check import AccessRightsChecker, check_record, shared_vocabulary

__all__ = ["AccessRightsChecker", "check_record", "shared_vocabulary"]
