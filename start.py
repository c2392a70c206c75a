#!/usr/bin/env python3
"""vcard-extract — vCard to table/CSV.  Run with:  python3 start.py export contacts.vcf"""
import sys
import os

script_dir = os.path.dirname(os.path.abspath(__file__))
src_dir    = os.path.join(script_dir, "src")

sys.path.insert(0, src_dir)
os.environ["PYTHONPATH"] = src_dir + os.pathsep + os.environ.get("PYTHONPATH", "")

from vcard_extract.cli import app
app()
