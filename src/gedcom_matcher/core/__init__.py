"""
Core orchestration: session state, deferred edits, the reconciliation driver
and the file-to-file pipeline.
"""
