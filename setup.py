"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='treelox',
	version='0.1.0',
	packages=['treelox', "treelox.tree_walker", ],
	license='MIT',
	description='A tree-walking interpreter core for a small scripting language with closures and classes',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
