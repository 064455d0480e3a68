"""Tests for the JWT auth service."""
