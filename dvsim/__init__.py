"""Discrete-event simulation of distance-vector routing on a fixed four-node network."""

__version__ = "0.1.0"