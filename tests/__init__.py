"""Tests for the SolarLog Online client."""
