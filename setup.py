import setuptools

with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name='riffio',
    version='0.1.0',
    description='Read, edit and write RIFF container files (AVI, WAV, WebP...).',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_namespace_packages(where='src', include=['riffio*']),
    package_dir={'': 'src'},
    install_requires=[
        'deal',
        'parse',
        'typer',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Programming Language :: Python :: 3',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Topic :: Multimedia',
        'Topic :: Utilities'
    ],
    python_requires='>=3.8',
    keywords='riff avi wav webp chunk list fourcc parse edit mmap'
)
