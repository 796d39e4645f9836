import sys

from setuptools import setup

sys.path.insert(0, 'monitor_input_control')
from _version import __author__, __version__  # noqa: E402

setup(
    name='monitor_input_control',
    version=__version__,
    license='MIT',
    author=__author__,
    packages=['monitor_input_control'],
    install_requires=[
        'pywin32 ; platform_system=="Windows"',
        'wmi ; platform_system=="Windows"'
    ],
    extras_require={
        'test': ['pytest', 'pytest-mock']
    },
    description='Toggle monitor input sources and adjust OSD settings over DDC/CI on Windows',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Operating System :: Microsoft :: Windows :: Windows 10',
        'Programming Language :: Python :: 3 :: Only'
    ],
    python_requires='>=3.8'
)
