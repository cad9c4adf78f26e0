"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='ppaaee',
	version='0.1.0',
	packages=['ppaaee', ],
	entry_points={
		'console_scripts': ["ppaaee = ppaaee.cmdline:main"],
	},
	license='MIT',
	description='An embeddable calculator and small scripting language with scoped variables, loops, functions, and procedures',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Scientific/Engineering :: Mathematics",
		"Environment :: Console",
    ],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
)
