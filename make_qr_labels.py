#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Generate labeled QR codes for a numeric range and a printable PDF sheet.
"""

# local repo modules
import qr_label_sheets.cli


if __name__ == "__main__":
	qr_label_sheets.cli.main()
