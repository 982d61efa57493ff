"""Peer review refiner: structured peer feedback rewritten by an LLM, one section at a time."""

__version__ = "0.1.0"
