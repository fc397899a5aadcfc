"""Gradio user interface for Imaginator."""
