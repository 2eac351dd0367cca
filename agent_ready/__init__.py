"""
AgentReady package initializer.
Defines package version; the CLI lives in ``agent_ready.cli``.
"""
__version__ = "0.1.0"
