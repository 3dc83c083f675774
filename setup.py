import os
from setuptools import find_packages, setup


PKG_NAME = 'fdnn'

VERSION_MAJOR = 0
VERSION_MINOR = 0
VERSION_MICRO = 1
VERSION = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_MICRO}"


def write_version():
    with open(os.path.join(PKG_NAME, '_version.py'), 'w') as f:
        f.write(f'version = "{VERSION}"\n')


if __name__ == '__main__':
    write_version()

    setup(
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Intended Audience :: Science/Research',
            'Intended Audience :: Developers',
            'Programming Language :: Python',
            'Programming Language :: Python :: 3',
            'Topic :: Scientific/Engineering',
            'Topic :: Scientific/Engineering :: Artificial Intelligence',
            'Topic :: Scientific/Engineering :: Mathematics',
            'Operating System :: OS Independent',
        ],
        description=('Fixed-dimension dense linear algebra and a two-layer '
                     'network trained by mini-batch gradient descent'),
        entry_points={
            'console_scripts': [
                'fdnn-train = fdnn.train:main',
            ],
        },
        extras_require={
            'test': ['pytest'],
        },
        install_requires=[
            'matplotlib',
            'numpy',
            'scipy',
        ],
        license='MIT',
        name=PKG_NAME,
        packages=find_packages(include=[PKG_NAME, PKG_NAME + '.*']),
        python_requires='>=3.6',
        version=VERSION,
    )
