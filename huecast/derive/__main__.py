# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

import sys

from huecast.derive.cli import main

sys.exit(main())
