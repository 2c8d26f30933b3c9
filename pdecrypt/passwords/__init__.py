"""Candidate password generation."""
