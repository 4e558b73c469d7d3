"""caconf core - configuration value resolution shared by every CA service."""
