"""octodeploy CLI commands"""
