"""
errors.py
Exception taxonomy. Each error carries the process exit code cli.main returns.
  - UsageError      -> 2 (bad flags, ambiguous requests, declined prompts)
  - OperationError  -> 1 (missing privilege/keyfile, existing destination, failed copy)
  - DelegateError   -> exit status of the external tool that failed
"""
from __future__ import annotations


class ChrootEditError(Exception):
    exit_code = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(ChrootEditError):
    exit_code = 2


class OperationError(ChrootEditError):
    exit_code = 1


class DelegateError(ChrootEditError):
    def __init__(self, tool: str, returncode: int):
        super().__init__(f"{tool} failed with exit status {returncode}", exit_code=returncode if returncode > 0 else 1)
        self.tool = tool
        self.returncode = returncode
