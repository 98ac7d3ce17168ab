"""Song Library API package"""
