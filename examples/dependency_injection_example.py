#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
依赖注入示例

展示模块定义、提供者延迟实例化、locals 覆盖和循环依赖检测

运行: python examples/dependency_injection_example.py
查看模块图: modinject graph examples.dependency_injection_example orders
"""

from modinject import CircularDependencyError, create_injector, inject, module


# ==================== 基础模块 ====================

class DatabaseClient:
    """数据库客户端"""

    def __init__(self, dsn: str):
        self.dsn = dsn
        print(f"✅ DatabaseClient 已初始化（{dsn}）")

    def query(self, user_id: int):
        return {"id": user_id, "name": f"用户{user_id}", "email": f"user{user_id}@example.com"}


class DatabaseProvider:
    """数据库提供者 - 首次 get('db') 时才创建连接"""

    @inject('dsn')
    def get(self, dsn):
        return DatabaseClient(dsn)


module('infrastructure', []) \
    .constant('dsn', 'sqlite:///example.db') \
    .provider('db', DatabaseProvider())


# ==================== 业务模块 ====================

class UserRepository:
    """用户仓储 - 依赖 db"""

    def __init__(self, db: DatabaseClient):
        self.db = db
        print("✅ UserRepository 已初始化（依赖: db）")

    def find_by_id(self, user_id: int):
        return self.db.query(user_id)


class EmailService:
    """邮件服务"""

    def __init__(self, sender: str):
        self.sender = sender

    def send_email(self, to: str, subject: str):
        print(f"📧 {self.sender} -> {to}: {subject}")
        return {"status": "sent", "to": to, "subject": subject}


class OrderService:
    """订单服务 - 依赖 user_repository 和 mailer"""

    def __init__(self, user_repository: UserRepository, mailer: EmailService):
        self.user_repository = user_repository
        self.mailer = mailer

    def create_order(self, user_id: int, product: str):
        user = self.user_repository.find_by_id(user_id)
        self.mailer.send_email(user["email"], f"订单 {product} 已创建")
        return {"order_id": 12345, "user_id": user_id, "product": product}


module('orders', ['infrastructure']) \
    .constant('sender', 'noreply@example.com') \
    .provider('user_repository', {'$get': ['$injector', lambda injector: injector.instantiate(UserRepository)]}) \
    .provider('mailer', {'$get': ['sender', EmailService]}) \
    .provider('order_service', {'$get': ['user_repository', 'mailer', OrderService]})

# 互相依赖的提供者，解析时报告循环
module('cyclic', []) \
    .provider('ping', {'$get': ['pong', lambda pong: pong]}) \
    .provider('pong', {'$get': ['ping', lambda ping: ping]})


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("依赖注入示例")
    print("=" * 60 + "\n")

    injector = create_injector(['orders', 'cyclic'])

    order_service = injector.get('order_service')
    print(order_service.create_order(1, "键盘"))
    print("单例:", injector.get('order_service') is order_service)

    # locals 优先于已注册的依赖
    test_mailer = EmailService("test@example.com")
    print(injector.invoke(
        ['user_repository', 'mailer', OrderService],
        None,
        {'mailer': test_mailer}
    ).create_order(2, "鼠标"))

    try:
        injector.get('ping')
    except CircularDependencyError as e:
        print(f"❌ {e}")
