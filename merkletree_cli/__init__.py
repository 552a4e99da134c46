"""
merkletree CLI

Command-line front end: compute roots, extract proofs and verify
commitments for payload lists stored as JSON.
"""

__version__ = "0.1.0"
