"""
Chromium browser family extractors.

Covers Chrome, Chromium, Edge, Brave and Opera, which share the same
profile layout and storage formats.
"""
