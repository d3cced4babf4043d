from setuptools import setup

setup(
    name='atmfjstc-code-builder',
    version='1.0.0',

    author_email='atmfjstc@protonmail.com',

    package_dir={'': 'src'},
    packages=['atmfjstc.lib.code_builder'],

    install_requires=[
        'atmfjstc-py-lang-utils>=1, <2',
    ],

    extras_require={
        'test': ['pytest'],
    },

    zip_safe=True,

    description="A stateful builder for generating code in C-like languages with automatic indentation",

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Code Generators",
    ],
    python_requires='>=3.7',
)
