"""
gaussbinom.io
=============
Checkpoints (.bin), reports (.dat), manifest.yaml.
"""
