"""
Supporting utilities for EXPLVIS: JSON trace loading, the render
boundary, and structured logging.
"""
