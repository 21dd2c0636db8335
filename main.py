#!/usr/bin/env python3
"""
DNS Record Tools - Main Entry Point

This is the main entry point for the dns-records CLI.
It can be run directly or imported as a module.
"""

from dns_record_tools.cli.main import main

if __name__ == "__main__":
    main()
