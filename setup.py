from setuptools import setup, find_packages

setup(
    name='apkfetch',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.10',
    install_requires=[
        'requests',
        'beautifulsoup4',
        'rich',
        'PyYAML',
        'platformdirs',
    ],
    extras_require={
        'test': [
            'pytest<9',
            'pytest-mock',
        ],
    },
    entry_points={
        'console_scripts': [
            'apkfetch=apkfetch.cli:main',
        ],
    },
)
