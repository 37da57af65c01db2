"""Beacon chain types, attestation pooling, LMD-GHOST fork choice, deposit trees and chain storage."""

__version__ = "0.1.0"