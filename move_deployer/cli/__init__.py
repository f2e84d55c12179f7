"""Command line interface for move-deployer"""
