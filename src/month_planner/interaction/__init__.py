"""Pointer interaction state machine, drag payloads and edit-form routing."""
