#!/usr/bin/env python3
"""
GoDaddy DNS Records Manager - Main Entry Point

This is the main entry point for the GoDaddy DNS Records Manager.
It can be run directly or imported as a module.
"""

from godaddy_dns.cli.main import main

if __name__ == "__main__":
    main()
