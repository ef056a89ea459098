from setuptools import setup, find_packages

setup(
    name='lineup-substitution',
    version='0.1.0',
    description='Literal search and replace that keeps parameters aligned on the parenthesis',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    author='Siergej Sobolewski',
    author_email='s.sobolewski@hotmail.com',
    url='https://github.com/yourusername/lineup-substitution',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'toml>=0.10.2',
        'chardet>=5.0.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'lineup-substitution = lineup_substitution.cli:main'
        ]
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Programming Language :: Python :: 3.11',
    ],
    python_requires='>=3.11',
    license='GPLv3',
)
