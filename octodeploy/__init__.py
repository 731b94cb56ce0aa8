"""octodeploy - Octopus Deploy build steps driven through the Octopus CLI"""

__version__ = "1.0.0"
