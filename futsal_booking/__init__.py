"""Futsal court and kit rental booking service."""
