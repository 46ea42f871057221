"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='lazlo',
	version='0.1.0',
	packages=['lazlo', "lazlo.adapters", ],
	entry_points={
		'console_scripts': ["lazlo = lazlo.cmdline:main"],
	},
	license='MIT',
	description='A call-by-need interpreter core: thunks, scopes, and call frames that force on return',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.11",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
