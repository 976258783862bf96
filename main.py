#!/usr/bin/env python3
"""
IPAM DNS Sync - Main Entry Point

This is the main entry point for IPAM DNS Sync.
It can be run directly or imported as a module.
"""

from ipam_dns_sync.cli.main import main

if __name__ == "__main__":
    main()
