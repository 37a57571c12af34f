"""服务功能模块"""
