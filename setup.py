#!/usr/bin/env python

from setuptools import setup, find_packages

long_description = open("README.rst").read()
install_requires = ['packaging',
                    'numpy>=1.18.5',
                    'quantities>=0.12.1',
                    'scipy>=1.0.0']
extras_require = {
    'gui': ['PySide6'],
    'test': ['pytest'],
}
extras_require["all"] = sum(extras_require.values(), [])

with open("labchartio/version.py") as fp:
    d = {}
    exec(fp.read(), d)
    labchartio_version = d['version']

setup(
    name="labchartio",
    version=labchartio_version,
    packages=find_packages(include=["labchartio", "labchartio.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    description="Restructure LabChart recordings exported to MATLAB format "
                "into one time series per channel and block, with units, "
                "sampling metadata and comments",
    long_description=long_description,
    license="BSD-3-Clause",
    python_requires=">=3.8",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: BSD License',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Scientific/Engineering']
)
