"""Project inputs — the manifest, the lock file, and the install tree.

All access here is read-only. The install tree is only ever changed by the
external installer, between reconciliation passes.
"""
