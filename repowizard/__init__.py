"""repowizard - 交互式代码仓选择向导"""

__version__ = "0.1.0"
