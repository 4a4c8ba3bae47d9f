from setuptools import setup, find_packages

setup(
    name='clusterboot',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'kubernetes>=24.2.0',
        'urllib3',
        'pydantic>=2',
        'PyYAML',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
        ]
    },
    description='Kubernetes client for node discovery, CSR approval and etcd overrides during cluster bootstrap',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: POSIX :: Linux',
    ],
    python_requires='>=3.8',
)
