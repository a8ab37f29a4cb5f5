# setup.py
from setuptools import setup, find_packages

setup(
    name="slisp",
    version="0.1.0",
    description="A small drawing S-expression interpreter with a language server",
    packages=find_packages(include=["slisp", "slisp.*", "slisp_lsp", "slisp_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "slisp=slisp.cli:main",
            "slisp-ls=slisp_lsp.server:main",
            "slisp-repl-server=slisp_lsp.repl_server:main",
        ],
    },
    zip_safe=False,
)
