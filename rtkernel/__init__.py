"""Model of an OSEK/AUTOSAR-style kernel: task scheduling, schedule tables, status codes and system log."""

__version__ = "0.1.0"