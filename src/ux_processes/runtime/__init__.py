"""Process runtime: task definitions, the process context and a local executor.

Processes are written against ``ProcessContext``. The local runtime resolves
each task by materialising an effect workdir and running a CLI agent
(codex, claude, gemini) over on-disk JSON contracts, retried through Prefect.
Breakpoints go to an ``Approver`` and never touch task execution.
"""
