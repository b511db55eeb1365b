"""Configuration, logging, persistence and validation primitives."""
