#!/usr/bin/env python3
from setuptools import setup

setup(
    name='lesscompanion',
    version='0.1',
    packages=[
        'lesscompanion',
        'lesscompanion.app',
        'lesscompanion.commands',
        'lesscompanion.commands.builtins',
        'lesscompanion.plugins',
        'lesscompanion.plugins.builtins'],
    scripts=['scripts/lesscompanion'],
    install_requires=['docopt', 'jinja2', 'lesscpy'],
    extras_require={
        'test': ['pytest']
    },
    python_requires='>=3.8',
    license='Apache License, Version 2.0',
    description='Automatic Less compiler for templates, compiling on page render and template style save'
)
