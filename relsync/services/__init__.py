"""Reconciliation stages and the run driver."""
