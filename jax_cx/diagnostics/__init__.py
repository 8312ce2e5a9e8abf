"""Diagnostics for charge exchange components."""

from jax_cx.diagnostics.output import DiagnosticOutput

__all__ = ["DiagnosticOutput"]
