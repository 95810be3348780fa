"""
Trip planner backend
"""
