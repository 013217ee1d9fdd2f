"""
installrag Setup Script

Install with: pip install -e .
"""

from setuptools import setup, find_packages

setup(
    name='installrag',
    version='0.1.0',
    description='Installation topology loader and record builder for retrieval-augmented generation',
    packages=find_packages(include=['installrag', 'installrag.*']),
    package_data={
        'installrag.config': ['*.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'pyyaml>=6.0.1',
        'structlog>=23.2.0',
        'tiktoken>=0.5.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
        ],
    },
    python_requires='>=3.11',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Scientific/Engineering :: Artificial Intelligence',
    ],
)
