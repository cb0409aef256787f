"""vaultplans — technical plan lifecycle manager for Obsidian vaults."""

__version__ = "0.4.0"
