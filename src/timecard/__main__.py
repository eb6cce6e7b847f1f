# SPDX-License-Identifier: MIT

from timecard import main

main()
