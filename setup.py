import os

from setuptools import setup

if os.getenv("MYPYC_ENABLE", "").lower() in ["true", "t", "1"]:
    from mypyc.build import mypycify

    ext_modules = mypycify(
        [
            "src/caption_tools/cdp",
            "src/caption_tools/cea708",
            "--exclude",
            "binary_types.py",
        ]
    )
else:
    ext_modules = []

setup(
    ext_modules=ext_modules,
)
