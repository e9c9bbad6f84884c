from setuptools import setup

setup(
    name='bitcursor',
    version='0.0.1',
    url='',
    license='AGPL-3.0-only',

    description='Bit-granular big-endian reader over byte streams',
    long_description='',

    packages=['bitcursor'],

    python_requires='>3.10',

    extras_require={
        'dev': [
            'mypy>=0.991',
            'flake8>=5.0.4',
            'pytest>=7.2.0'
        ]
    },

    entry_points={
        'console_scripts': [
            'bitcursor = bitcursor.__main__:main'
        ]
    }
)
