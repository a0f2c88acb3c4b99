from setuptools import find_packages, setup

setup(
    name='rlecodec',
    version='1.0.0',
    description='Byte-oriented run-length encoding codec with a 7-bit run header format',
    author='isantolin',
    author_email='',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.11',
    install_requires=[
        'msgspec>=0.18',
        'construct',
        'marshmallow>=3.13',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'rle-debug=rlecodec.tools.token_debug:main',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
)
