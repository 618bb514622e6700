"""
算法管理器

按名称注册和执行生成树算法，记录执行指标和日志。
所有执行均为顺序执行。
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from .base import Algorithm
from .config import Settings, get_settings
from .graph.mst import GraphLike, KruskalMST, MSTResult, PartialTreeMST
from .logging_setup import get_logger


class AlgorithmCategory(Enum):
    """算法分类枚举"""
    SPANNING_TREE = "spanning_tree"


@dataclass
class AlgorithmMetrics:
    """算法执行指标"""
    execution_time: float
    success: bool = True
    error_message: Optional[str] = None
    input_size: Optional[int] = None


@dataclass
class AlgorithmConfig:
    """算法配置"""
    enable_metrics: bool = True  # 是否启用指标收集


class AlgorithmRegistry:
    """算法注册表"""

    def __init__(self):
        self._algorithms: Dict[str, Type[Algorithm]] = {}
        self._categories: Dict[str, AlgorithmCategory] = {}
        self._configs: Dict[str, AlgorithmConfig] = {}
        self._register_default_algorithms()

    def _register_default_algorithms(self) -> None:
        """注册默认算法"""
        self.register("partial_tree", PartialTreeMST, AlgorithmCategory.SPANNING_TREE)
        self.register("kruskal", KruskalMST, AlgorithmCategory.SPANNING_TREE)

    def register(self, name: str, algorithm_class: Type[Algorithm],
                 category: AlgorithmCategory, config: Optional[AlgorithmConfig] = None) -> None:
        """
        注册算法

        Args:
            name: 算法名称
            algorithm_class: 算法类
            category: 算法分类
            config: 算法配置

        Raises:
            ValueError: 算法类没有继承 Algorithm
        """
        if not (isinstance(algorithm_class, type) and issubclass(algorithm_class, Algorithm)):
            raise ValueError(f"算法类 {algorithm_class} 必须继承自 Algorithm")

        self._algorithms[name] = algorithm_class
        self._categories[name] = category
        self._configs[name] = config or AlgorithmConfig()

    def get_algorithm(self, name: str) -> Type[Algorithm]:
        """获取算法类"""
        if name not in self._algorithms:
            raise KeyError(f"未找到算法: {name}")
        return self._algorithms[name]

    def get_category(self, name: str) -> Optional[AlgorithmCategory]:
        """获取算法分类"""
        return self._categories.get(name)

    def get_config(self, name: str) -> AlgorithmConfig:
        """获取算法配置"""
        return self._configs.get(name, AlgorithmConfig())

    def list_algorithms(self, category: Optional[AlgorithmCategory] = None) -> List[str]:
        """列出算法"""
        if category is None:
            return list(self._algorithms.keys())
        return [name for name, cat in self._categories.items() if cat == category]


class AlgorithmManager:
    """
    算法管理器

    统一执行已注册的算法，并保留每个算法最近的执行指标。
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.logger = get_logger(__name__)
        self.settings = settings or get_settings()
        self.registry = AlgorithmRegistry()
        self._metrics_history: Dict[str, List[AlgorithmMetrics]] = {}

    def _instantiate(self, algorithm_class: Type[Algorithm]) -> Algorithm:
        if issubclass(algorithm_class, PartialTreeMST):
            return algorithm_class(check_partition=self.settings.mst.check_partition)
        return algorithm_class()

    def execute_algorithm(self, algorithm_name: str, *args, **kwargs) -> Any:
        """
        执行算法

        Args:
            algorithm_name: 算法名称
            *args: 算法参数
            **kwargs: 算法关键字参数

        Returns:
            算法执行结果

        Raises:
            KeyError: 算法不存在
            Exception: 算法执行错误，原样抛出
        """
        algorithm_class = self.registry.get_algorithm(algorithm_name)
        config = self.registry.get_config(algorithm_name)
        record = config.enable_metrics and self.settings.mst.enable_metrics
        input_size = self._estimate_input_size(args, kwargs)
        log = self.logger.bind(algorithm=algorithm_name, input_size=input_size)

        start_time = time.perf_counter()

        try:
            algorithm = self._instantiate(algorithm_class)
            result = algorithm.execute(*args, **kwargs)
        except Exception as e:
            execution_time = time.perf_counter() - start_time
            if record:
                self._record_metrics(algorithm_name, AlgorithmMetrics(
                    execution_time=execution_time,
                    success=False,
                    error_message=str(e),
                    input_size=input_size
                ))
            log.error("algorithm_failed", error=str(e), error_type=type(e).__name__,
                      execution_time=round(execution_time, 6))
            raise

        execution_time = time.perf_counter() - start_time
        if record:
            self._record_metrics(algorithm_name, AlgorithmMetrics(
                execution_time=execution_time,
                success=True,
                input_size=input_size
            ))
        log.info("algorithm_succeeded", execution_time=round(execution_time, 6))
        return result

    def minimum_spanning_tree(self, graph: GraphLike) -> MSTResult:
        """使用配置中指定的算法计算最小生成树"""
        return self.execute_algorithm(self.settings.mst.algorithm, graph)

    def get_metrics(self, algorithm_name: str) -> List[AlgorithmMetrics]:
        """获取算法执行指标"""
        return self._metrics_history.get(algorithm_name, [])

    def get_performance_summary(self, algorithm_name: str) -> Dict[str, Any]:
        """
        获取算法性能摘要

        Args:
            algorithm_name: 算法名称

        Returns:
            性能摘要字典，没有记录时为空字典
        """
        metrics = self.get_metrics(algorithm_name)
        if not metrics:
            return {}

        successful_metrics = [m for m in metrics if m.success]
        if not successful_metrics:
            return {"total_executions": len(metrics), "success_rate": 0.0}

        execution_times = [m.execution_time for m in successful_metrics]

        return {
            "total_executions": len(metrics),
            "successful_executions": len(successful_metrics),
            "success_rate": len(successful_metrics) / len(metrics),
            "avg_execution_time": sum(execution_times) / len(execution_times),
            "min_execution_time": min(execution_times),
            "max_execution_time": max(execution_times),
            "total_execution_time": sum(execution_times)
        }

    @staticmethod
    def _estimate_input_size(args: tuple, kwargs: dict) -> Optional[int]:
        """估算输入规模（图的顶点数）"""
        total_size = 0
        for value in (*args, *kwargs.values()):
            if hasattr(value, '__len__'):
                total_size += len(value)
        return total_size if total_size > 0 else None

    def _record_metrics(self, algorithm_name: str, metrics: AlgorithmMetrics) -> None:
        """记录算法执行指标"""
        history = self._metrics_history.setdefault(algorithm_name, [])
        history.append(metrics)

        # 限制历史记录数量
        max_history = self.settings.mst.max_history
        if len(history) > max_history:
            self._metrics_history[algorithm_name] = history[-max_history:]

