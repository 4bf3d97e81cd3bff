#!/usr/bin/env python
from setuptools import setup
import os


def get_version():
    curdir = os.path.dirname(__file__)
    filename = os.path.join(curdir, 'src', 'design2svg', 'version.py')
    with open(filename, 'rb') as fp:
        return fp.read().decode('utf8').split('=')[1].strip(" \n'")


def readme():
    with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as f:
        return f.read()


setup(
    name='design2svg',
    version=get_version(),
    description='Compose a logo and styled text into SVG and raster artwork',
    long_description=readme(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
    ],
    keywords='logo text svg engraving',
    license='MIT License',
    package_dir={'': 'src'},
    packages=[
        'design2svg',
        'design2svg.core',
        'design2svg.rasterizer',
    ],
    python_requires='>=3.10',
    install_requires=[
        'pillow',
        'resvg-py',
        'fonttools',
        'brotli',
    ],
    extras_require={
        'test': [
            'pytest'],
    },
    include_package_data=True,
    entry_points={
        'console_scripts': ['design2svg=design2svg.__main__:main']
    },
    )
