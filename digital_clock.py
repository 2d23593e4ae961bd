#!/usr/bin/env python3
"""
Clock Pro - Advanced Clock
Features: Timezones, 12/24h format, analog hand angles, Alarm, Notifications
"""

import sys

from clockpro.app import main

if __name__ == "__main__":
    sys.exit(main())
