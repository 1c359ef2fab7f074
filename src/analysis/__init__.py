"""Modality analyzers, oracle response normalization and result mapping."""
