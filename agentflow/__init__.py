"""Agentflow - run graphs of generative and deterministic agents as pipelines."""

__version__ = "0.1.0"
