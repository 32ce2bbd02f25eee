"""Geometry generators and their configuration."""
