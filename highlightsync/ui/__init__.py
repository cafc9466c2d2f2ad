"""Tk user interface for the highlight dashboard."""
