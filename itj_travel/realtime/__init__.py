"""Realtime infrastructure (Socket.IO rooms, presence and event fan-out).

Location, panic, profile and notification events all share one socket server
and one room registry per process.
"""
