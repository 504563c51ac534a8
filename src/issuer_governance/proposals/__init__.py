"""Proposal assembly and broadcast against the multisig."""
