"""
MachineLicenseService project package.
"""
