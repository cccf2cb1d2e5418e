# -*- coding: utf-8 -*-

"""
Main entry point for launching the TreeView Toolkit browser from a checkout.
"""

import sys

from treeview_toolkit.app import main

if __name__ == '__main__':
    sys.exit(main())
