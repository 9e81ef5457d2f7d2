"""Reconciliation — compare manifest, lock, and install tree, then remediate.

This package provides:
- Classifier: the condition of each declared dependency
- Peer auditor: required peers missing next to a matched install
- Plan builder: install list, error set, and findings for one pass
- Executor: the prompt / install / recheck state machine
"""
